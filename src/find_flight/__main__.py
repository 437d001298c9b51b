from find_flight.presentation.cli import main

if __name__ == "__main__":
    main()
