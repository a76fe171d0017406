from finz.app.main import main

main()
