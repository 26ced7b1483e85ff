"""prismdocs core: run context, configuration, logging and error contracts."""
