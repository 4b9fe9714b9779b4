"""
Sample data for Yardbook.
Fills an empty jobs collection with a few jobs so the screens have something to show.
Dates are deliberately stored in the different shapes found in real data.
"""

import logging
from datetime import date, datetime, timedelta

logger = logging.getLogger(__name__)


def sample_jobs(today=None):
    """A week of sample jobs around `today`."""
    today = today or date.today()
    return [
        {
            'id': 'sample-mow-1',
            'name': 'Front lawn mow',
            'email': 'pat.lee@example.com',
            'phone': '555-201-3344',
            'address': '12 Elm Street, Springfield',
            'date': today.isoformat(),
            'price': '45',
            'info': 'Side gate code 1234',
            'completed': False,
        },
        {
            'id': 'sample-hedge-2',
            'name': 'Hedge trimming',
            'email': 'sam.ortiz@example.com',
            'phone': '555-876-1200',
            'address': '88 Birch Avenue, Springfield',
            'date': datetime.combine(today + timedelta(days=2), datetime.min.time()),
            'price': 120,
            'info': 'Take clippings away',
            'completed': False,
        },
        {
            'id': 'sample-sod-3',
            'firstName': 'Jordan',
            'lastName': 'Reyes',
            'email': 'jordan.reyes@example.com',
            'address': '4 Maple Court, Shelbyville',
            'date': (today + timedelta(days=5)).strftime('%a %b %d %Y'),
            'time': '9:00 AM',
            'description': 'Lay new sod in the back yard',
            'yardage': '300 sq yd',
            'price': '$1,250.00',
        },
        {
            'id': 'sample-cleanup-4',
            'name': 'Autumn cleanup',
            'email': 'casey.nguyen@example.com',
            'phone': '555-443-9090',
            'address': '230 Oak Road, Springfield',
            'date': (today - timedelta(days=3)).isoformat(),
            'price': '200',
            'info': 'Leaves and gutters',
            'completed': True,
        },
    ]


def seed_sample_jobs(store, today=None):
    """
    Add the sample jobs when the collection is empty.

    Returns:
        Number of jobs added
    """
    if store.fetch_jobs(limit=1):
        logger.info("Jobs collection already has data, skipping sample seed")
        return 0

    jobs = sample_jobs(today)
    for job in jobs:
        store.add_job(job)

    logger.info(f"Seeded {len(jobs)} sample jobs")
    return len(jobs)
