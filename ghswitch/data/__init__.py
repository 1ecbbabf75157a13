"""File-backed stores: app config, SSH client config, git credentials."""
