"""Non-UI services: loading, layout, navigation."""
