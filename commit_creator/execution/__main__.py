from commit_creator.execution.cli import main

main()
