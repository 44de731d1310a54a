"""Kernel – errors, privilege model, identity codec and catalog models."""
