"""Maintenance helpers for the SkillScan repository."""
