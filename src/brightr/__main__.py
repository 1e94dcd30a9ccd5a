from brightr.cli import main

main()
