from gcemodel.cli import main

main()
