from filehub.cli import main

main()
