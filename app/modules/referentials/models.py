# Supabase table: referentials
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- data_model_id: uuid (foreign key to data_models.id)
- name: text (not null)
- description: text (nullable)
- color: text (default: '#6366F1')
- created_by: uuid (foreign key to auth.users.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

entities.referential_id points here and is cleared when the referential
is deleted.
"""
