"""Learning bounded context: generated problems and graded attempts."""
