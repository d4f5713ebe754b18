from taskmanager.main import main

main()
