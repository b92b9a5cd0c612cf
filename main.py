#!/usr/bin/env python3
from logging.config import dictConfig
from typing import Union
import argparse
import logging
import os
import json
import sys

from deal_roster_sync import RosterSynchronizer, SyncSchedule, exceptions


def setup_logging(config_file: str = None, log_dir: str = None,
                  log_level: Union[str, int] = None) -> dict:
    if config_file is None:
        config_file = os.path.join(os.getcwd(), 'logging_config.json')

    if log_level is None:
        log_level = os.environ.get('LOGLEVEL', logging.INFO)

    with open(config_file, 'r') as f:
        config = json.load(f)

    for obj_type in 'loggers', 'handlers':
        obj: dict
        for obj in config[obj_type].values():
            if obj['level'] in ('NOTSET', logging.NOTSET):
                # Use environment variable if level is not set
                obj['level'] = log_level
            if (obj_type == 'handlers'
                    and log_dir is not None
                    and 'filename' in obj.keys()):
                obj['filename'] = os.path.join(log_dir, obj['filename'])

    return config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Synchronize the student rosters written in deal notes.'
    )
    parser.add_argument('deal_ids', nargs='*',
                        help='deals to synchronize; defaults to the '
                             'schedule at SCHEDULE_PATH')
    parser.add_argument('--session', dest='session_id', default=None,
                        help='send students to this session instead of '
                             'the default one')
    parser.add_argument('--notify-no-changes', action='store_true',
                        help='report deals that are already in sync')
    return parser.parse_args(argv)


def load_schedule(args: argparse.Namespace) -> SyncSchedule:
    if args.deal_ids:
        return SyncSchedule(deal_ids=args.deal_ids,
                            notify_on_no_changes=args.notify_no_changes,
                            notify_on_missing_note=True,
                            session_id=args.session_id)

    schedule_path = os.environ.get('SCHEDULE_PATH', 'roster_schedule.json')
    try:
        schedule = SyncSchedule.from_json(schedule_path)
    except FileNotFoundError:
        schedule = SyncSchedule.default()
    if args.session_id:
        schedule.session_id = args.session_id
    if args.notify_no_changes:
        schedule.notify_on_no_changes = True
    return schedule


def main(argv=None) -> int:
    logging_config = setup_logging(log_dir=os.environ.get('LOGDIR'))
    dictConfig(logging_config)

    logger = logging.getLogger(__name__)
    schedule = load_schedule(parse_args(argv))

    try:
        sync_agent = RosterSynchronizer()
        status = sync_agent.run_schedule(schedule)
    except exceptions.ErpError:
        logger.exception('Could not finish sync.')
        return 1

    return 1 if 'failed' in status.values() else 0


if __name__ == '__main__':
    sys.exit(main())
