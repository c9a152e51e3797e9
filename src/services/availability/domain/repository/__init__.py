from .blackout_repository import BlackoutRepository as BlackoutRepository
