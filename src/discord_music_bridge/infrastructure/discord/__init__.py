"""Discord gateway integration: client, dispatch, handlers, event bridge."""
