"""
This module coordinates the synchronization of deal note rosters with
the students stored for each training session. The main class is
`RosterSynchronizer`, found in the `roster_synchronizer` submodule. It
fetches what a deal needs (notes, sessions, students) and hands the
work to the `NoteRosterDelegate`, found in the `delegates` submodule.
Which rosters were already applied is remembered by the
`ProcessedSignatureStore` of the `signature_store` submodule.
"""


from .delegates import SyncOutcome
from .roster_synchronizer import RosterSynchronizer
from .signature_store import ProcessedSignatureStore
