# Supabase table: auth_settings
# One row per user, keyed by user_id

"""
Expected Supabase table structure:

auth_settings:
- id: uuid (primary key)
- created_at: timestamp (default: now())
- updated_at: timestamp
- user_id: uuid (unique, references auth.users.id)
- enable_2fa: boolean (default false)
- session_timeout_minutes: integer (default 60, > 0)
- require_password_change: boolean (default false)
- last_password_change: timestamp (nullable)
- failed_login_attempts: integer (default 0)
- account_locked_until: timestamp (nullable) - locked while in the future
- email_notifications: boolean (default true)
- login_notification: boolean (default false)
- allowed_ip_addresses: text[] (nullable)
- security_questions_set: boolean (default false)
- backup_email: text (nullable)
"""
