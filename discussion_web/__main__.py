from discussion_web.main import main

main()
