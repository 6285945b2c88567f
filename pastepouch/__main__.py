from pastepouch.main import main

main()
