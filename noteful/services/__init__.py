"""
Noteful API - Services Layer
============================

What:  Business logic layer sitting between routes (HTTP) and the database.
How:   Services take the request's AsyncSession, apply validation and CRUD
       rules, and return response models or raise application exceptions.

Service Inventory:
    - FolderService: folder CRUD and folder contents
    - NoteService:   note CRUD with partial-update merge
"""
