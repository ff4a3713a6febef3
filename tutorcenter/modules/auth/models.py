# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required for sessions - Supabase Auth handles:
# - User login and session management
# - JWT token generation and validation
# - Invitations (auth.admin.invite_user_by_email, see the users module)

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

The user's role is not stored in the token. It is read on every request
from user_profiles.role (see tutorcenter.core.dependencies) so that a role
change or deactivation takes effect immediately.
"""
