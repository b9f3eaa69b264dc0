"""Request entities and the approval item projection."""
