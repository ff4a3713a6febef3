# Supabase table: platnosci
# This file documents the expected database schema
# Actual operations are handled via the generic resource layer in service.py

"""
Expected Supabase table structure:

platnosci (payments):
- id: uuid (primary key)
- created_at: timestamp (default: now())
- created_by: uuid (references auth.users.id)
- student_id: uuid (references uczniowie.id, not null)
- zajecia_id: uuid (references zajecia.id, nullable)
- data_platnosci: date (not null)
- kwota: numeric (not null) - positive amount, validated by the API before insert
- waluta: text (default 'PLN')
- metoda: text (nullable) - payment method
- status: payment_status_enum (oczekuje | zapłacone | zaległe | anulowane)
- notatki: text (nullable)
- invoice_url: text (nullable)
"""
