"""Identity bounded context: learners and their profile data."""
