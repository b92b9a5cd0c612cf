"""
Synchronizes the student rosters that sales staff paste into CRM deal
notes with the students stored for each training session of the deal.

The :mod:`roster` subpackage parses and diffs rosters without touching
the network, :mod:`erp_data_models` talks to the ERP backend and
:mod:`synchronizer` ties both together.
"""

from . import exceptions
from .erp_session import ErpSession
from .sync_schedule import SyncSchedule
from .synchronizer import RosterSynchronizer, SyncOutcome
import deal_roster_sync.erp_data_models as edm
