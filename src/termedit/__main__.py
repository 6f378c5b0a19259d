from termedit.cli import main

main()
