from repofetch.cli import main

main()
