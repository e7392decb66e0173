from ghver.cli.app import main

main()
