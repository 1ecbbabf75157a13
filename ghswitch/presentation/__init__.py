"""Console presentation: rendering, prompts, menu and click commands."""
