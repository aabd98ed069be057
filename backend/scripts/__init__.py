"""
Backend Scripts Module

Available scripts:
    - seed_data.py: Creates sample users, memberships and a case for testing

Usage:
    python -m scripts.seed_data
"""
