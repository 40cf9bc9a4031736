from app_creator.cli import main

main()
