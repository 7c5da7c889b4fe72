# Supabase table: document_permissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

document_permissions:
- id: uuid (primary key)
- document_id: uuid (references documents.id, no cascade)
- user_id: uuid (references profiles.id) - grantee
- can_view: boolean (not null, default: true)
- can_edit: boolean (not null, default: false) - stored, never read
- granted_at: timestamp (default: now())
- unique constraint on (document_id, user_id)

Rows are inserted on grant and deleted on revoke, never updated. A row may
outlive its document; readers treat the missing document as deleted.
"""
