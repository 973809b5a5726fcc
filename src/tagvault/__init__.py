"""tagvault — keep note tags and vault locations mutually consistent."""
