from span_report.cli.app import main

main()
