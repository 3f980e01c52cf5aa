"""L4 Execution — everything that runs a process or touches the network."""
