# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation

"""
The superuser flag lives in the user's app_metadata, which only the
service-role key can write:

app_metadata:
- is_superuser: boolean (or the string "true"/"false" on older accounts)

It is read exactly once per request, in AuthService.get_current_user,
and exposed as CurrentUser.is_superuser. user_metadata is editable by
the user and is never consulted for access decisions.
"""
