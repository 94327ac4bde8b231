from gceme.main import main

main()
