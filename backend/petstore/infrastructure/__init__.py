"""Infrastructure — IO adapters: storage backends, database sessions, HTTP clients, logging."""
