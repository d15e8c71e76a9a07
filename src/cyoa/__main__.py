from cyoa.main import main

main()
