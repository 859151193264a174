"""Skill discovery and ranking engine for the SkillSwap platform."""
