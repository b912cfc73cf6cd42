from bounded_rng.cli import main

main()
