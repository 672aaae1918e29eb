"""Game domain services: factory, prize table and lifelines.

This package holds the game rules that the models call into, keeping
question selection and random generation apart from the ORM mapping.
"""
