"""Social bounded context - posts, likes and feed ranking."""
