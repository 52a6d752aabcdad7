# Supabase table: data_models
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, on delete cascade) - fixed at creation
- name: text (not null)
- description: text (nullable)
- version: text (default: '1.0')
- created_by: uuid (foreign key to auth.users.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
