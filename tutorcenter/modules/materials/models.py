# Supabase tables: diagnozy, ksiazki, linki, uczen_ksiazka, przedmiot_ucznia
# This file documents the expected database schema
# Actual operations are handled via the generic resource layer in service.py

"""
Expected Supabase table structure (every table also has id uuid primary key,
created_at timestamp default now(), created_by uuid references auth.users.id):

diagnozy (diagnostic assessments):
- student_id: uuid (references uczniowie.id, not null)
- subject: subject_enum (not null)
- data_testu: date (not null)
- narzedzie: text (nullable) - assessment tool
- wynik: numeric (nullable) - score
- rubric: jsonb (nullable)
- wnioski: text (nullable) - conclusions
- cele: text (nullable) - goals

ksiazki (books):
- tytul: text (not null)
- wydawnictwo: text (nullable) - publisher
- url: text (nullable)

linki (generic links attached to a student, class, book or diagnostic):
- owner_type: owner_type_enum (not null)
- owner_id: uuid (nullable)
- kind: link_kind_enum (not null)
- url: text (not null)
- label: text (nullable)
- metadata: jsonb (nullable)

uczen_ksiazka (book assignments):
- student_id: uuid (references uczniowie.id, not null)
- ksiazka_id: uuid (references ksiazki.id, not null)
- subject: subject_enum (nullable)
- unikalne: boolean (default false)

przedmiot_ucznia (subjects a student takes):
- student_id: uuid (references uczniowie.id, not null)
- subject: subject_enum (not null)
- notatki: text (nullable)
"""
