"""User domain core: entities, value objects, events, ports."""
