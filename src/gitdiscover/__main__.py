from gitdiscover.cli.cli import main

main()
