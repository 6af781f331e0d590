"""Domain layer: entities, value objects and domain rules with no infrastructure dependencies."""
