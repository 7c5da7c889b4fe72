# Supabase Auth
# This module uses Supabase's built-in authentication system.
# Accounts are provisioned outside this service; each one has a matching
# row in public.profiles carrying its role.

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.admin.sign_out(jwt) - Revoke one user's session

The role used for gating (admin | member) lives in profiles.role, not in
the auth user's metadata. See app/modules/users/models.py.
"""
