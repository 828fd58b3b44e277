"""Core domain logic: profiles, config resolution, runtime context."""
