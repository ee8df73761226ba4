from aoctool.cli import main

main()
