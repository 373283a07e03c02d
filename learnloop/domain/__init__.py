"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

Bounded contexts:
- identity: users and their progress counters
- progress: learning sessions, streak policy, achievements
- learning: topics and generated study material
- social: posts, likes and feed ranking
"""
