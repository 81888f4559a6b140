"""Platform services (logging) shared by the library."""
