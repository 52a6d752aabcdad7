# Supabase table: entities
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- data_model_id: uuid (foreign key to data_models.id, on delete cascade) - fixed at creation
- name: text (not null)
- description: text (nullable)
- position_x: float (default: 0) - diagram coordinates
- position_y: float (default: 0)
- referential_id: uuid (foreign key to referentials.id, nullable) - same data model
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
