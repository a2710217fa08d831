"""Domain layer: types, protocols, events and errors with no runtime behaviour."""
