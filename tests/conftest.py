from hypothesis import settings

# Disk-backed SQLite examples can exceed Hypothesis' default 200ms deadline.
settings.register_profile("default", deadline=None)
settings.load_profile("default")
