# Supabase table: relationships
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- data_model_id: uuid (foreign key to data_models.id)
- source_entity_id: uuid (foreign key to entities.id)
- target_entity_id: uuid (foreign key to entities.id)
- source_attribute_id: uuid (foreign key to attributes.id, nullable)
- target_attribute_id: uuid (foreign key to attributes.id, nullable)
- relationship_type: text (one-to-one | one-to-many | many-to-many)
- source_cardinality: text (nullable)
- target_cardinality: text (nullable)
- name: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Both entities must belong to data_model_id. Rows are removed by the
service when either entity or the data model is deleted.
"""
