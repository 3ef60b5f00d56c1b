"""Command-line interface."""
from zenparticles.main import main

if __name__ == "__main__":
    main()
