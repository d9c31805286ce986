from plar.cmdline import main

main()
