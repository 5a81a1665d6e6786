from lanchat.manager.main import main

main()
