"""tagvault command-line interface."""
