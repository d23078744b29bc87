from gitversion.main import main

main()
