"""mdBook preprocessor collecting ``{{#check}}`` directives into a checklist."""
