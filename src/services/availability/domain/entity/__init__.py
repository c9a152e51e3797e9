from .blackout import Blackout as Blackout
