import os

from pydantic import BaseModel, ConfigDict, Field

_ENV_PREFIX = "SPAN_REPORT_"


class RenderConfig(BaseModel):
    """Options that shape the label layout. The defaults reproduce rustc-like output.

    ``max_width`` bounds label messages, counted in source columns; longer
    messages wrap onto extra rows. ``None`` disables wrapping.
    """

    model_config = ConfigDict(frozen=True)

    tab_width: int = Field(default=4, ge=1)
    context_lines: int = Field(default=0, ge=0)
    elision_threshold: int = Field(default=3, ge=0)
    start_context_lines: int | None = Field(default=None, ge=0)
    end_context_lines: int | None = Field(default=None, ge=0)
    max_width: int | None = Field(default=100, ge=1)

    @property
    def lines_before(self) -> int:
        return self.context_lines if self.start_context_lines is None else self.start_context_lines

    @property
    def lines_after(self) -> int:
        return self.context_lines if self.end_context_lines is None else self.end_context_lines

    @classmethod
    def from_env(cls) -> "RenderConfig":
        """Build a config from ``SPAN_REPORT_*`` environment variables, falling back to defaults."""
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{_ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)
