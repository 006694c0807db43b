from nsmodernizer.cli import main

main()
