# Supabase tables: user_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key)
- user_id: uuid (unique, references auth.users.id) - created by a trigger on sign-up/invite
- role: user_role_enum (administrator | konsultant | nauczyciel | opiekun | uczen)
- is_active: boolean (default: true) - inactive users have no capabilities
- full_name: text (nullable)
- phone: text (nullable)
- last_login: timestamp (nullable)
- created_at: timestamp (default: now())

Note: email lives in auth.users and is only readable with the service_role
key, which is why the admin listing merges it in server side.
"""
