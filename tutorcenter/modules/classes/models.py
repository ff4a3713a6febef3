# Supabase table: zajecia
# This file documents the expected database schema
# Actual operations are handled via the generic resource layer in service.py

"""
Expected Supabase table structure:

zajecia (classes / lessons):
- id: uuid (primary key)
- created_at: timestamp (default: now())
- created_by: uuid (references auth.users.id)
- student_id: uuid (references uczniowie.id, not null)
- subject: subject_enum (matematyka | fizyka | informatyka, not null)
- start_at: timestamp (not null)
- end_at: timestamp (nullable) - expected after start_at, not enforced
- temat: text (nullable) - topic
- zrozumienie: smallint (nullable, 1-5) - understanding rating
- trudnosci: text (nullable) - difficulties
- praca_domowa: text (nullable) - homework description
- status_pd: homework_status_enum (brak | zadane | oddane | poprawa, default brak)
"""
