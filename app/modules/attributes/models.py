# Supabase table: attributes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- entity_id: uuid (foreign key to entities.id, on delete cascade)
- name: text (not null)
- data_type: text (not null)
- description: text (nullable)
- is_primary_key: boolean (default: false)
- is_foreign_key: boolean (default: false)
- is_unique: boolean (default: false)
- is_mandatory: boolean (default: false)
- is_calculated: boolean (default: false)
- calculation_rule: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
