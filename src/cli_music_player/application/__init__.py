"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: Menu actions dispatched onto the session controller
- queries/: Read-only views of the playback session
- services/: The session controller owning playback state
- interfaces/: Port interfaces for infrastructure adapters
"""
