"""Domain models — enums, configuration schemas, session state."""
