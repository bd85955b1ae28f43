"""
Service layer for the GameLift and PlayFab game backend SDKs.

This module provides thin asynchronous wrappers over the vendor clients,
separating callers from SDK calling conventions.
"""
