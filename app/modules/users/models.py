# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users
- full_name: text (nullable)
- role: text (not null, default: 'member') - values: admin, member
- created_at: timestamp (default: now())

Rows are created when an account is provisioned and are never modified or
deleted by this service.
"""
