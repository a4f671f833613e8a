from fqsplit.cli import main

main()
