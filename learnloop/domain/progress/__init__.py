"""Progress bounded context - learning sessions, streaks and achievements."""
