"""Domain layer: schema, record codec, validation rules and errors."""
