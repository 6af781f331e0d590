"""talkbuddy: personalized speaking exercises with progress and achievement tracking."""
