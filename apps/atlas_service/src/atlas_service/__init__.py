"""Country atlas application: observable view state and command-line entry point."""
