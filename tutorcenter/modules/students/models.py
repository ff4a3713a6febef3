# Supabase tables: uczniowie, student_guardians
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

uczniowie (students):
- id: uuid (primary key)
- created_at: timestamp (default: now())
- created_by: uuid (references auth.users.id, not null) - immutable, the owning teacher
- imie: text (not null) - first name
- nazwisko: text (not null) - last name
- email: text (nullable)
- telefon: text (nullable)
- whatsapp: text (nullable)
- messenger: text (nullable)
- szkola: text (nullable) - school
- klasa: text (nullable) - grade
- notatki: text (nullable) - free-text notes

student_guardians (many-to-many guardian <-> student):
- id: uuid (primary key)
- created_at: timestamp (default: now())
- student_id: uuid (references uczniowie.id, not null)
- guardian_user_id: uuid (references auth.users.id, not null)

Row-level security: teachers see the students they created, guardians see
students linked to them here, administrators and consultants see all.
"""
