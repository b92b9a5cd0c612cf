"""
This module contains class definitions for the "delegate" classes for
use in the `synchronizer` parent module. A delegate holds the sync
behavior for one kind of object and is called by the
`RosterSynchronizer` as if it were one of its methods.

`NoteRosterDelegate` applies the student roster written in a deal note
to the students of a training session, creating the missing ones and
fixing mismatching names.

See the documentation for each class for more information about the
specifics of their routines.
"""
from .base_delegate import SyncDelegate
from .note_roster_delegate import NoteRosterDelegate, SyncOutcome
