# Supabase tables: projects, project_members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- created_by: uuid (foreign key to auth.users.id, nullable) - creator, implicit admin
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

project_members:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, on delete cascade)
- user_id: uuid (foreign key to auth.users.id, on delete cascade)
- role: text (not null) - values: viewer, editor, admin
- email: text (nullable) - denormalised for member listings
- joined_at: timestamp (default: now())
- unique constraint on (project_id, user_id)

The creator never gets a project_members row; creator access is derived
from projects.created_by at resolution time.
"""
