"""persona-debate: turn-taking debates between two AI personas."""
