from patscan.cli import main

main()
