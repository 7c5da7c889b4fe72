# Supabase table: documents; storage bucket: documents
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

documents:
- id: uuid (primary key)
- title: text (not null, non-empty)
- content: text (nullable)
- file_path: text (nullable) - object key in the "documents" bucket
- file_name: text (nullable)
- file_size: bigint (nullable) - bytes, copied from storage metadata
- file_type: text (nullable) - MIME type, copied from storage metadata
- owner_id: uuid (foreign key to profiles.id, not null) - creating admin
- created_at: timestamp (default: now())

file_path/file_name/file_size/file_type are set together when a blob is
linked; a row without file_path is text-only.

Deleting a row leaves its blob in the bucket and its document_permissions
rows in place. Uploaded blobs that were never linked are not tracked.
"""
