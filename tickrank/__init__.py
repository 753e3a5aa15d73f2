"""tickrank: real-time ranking and volume-spike leaderboard engine."""
