"""Infrastructure layer — external CLI process adapter and manifest file I/O."""
