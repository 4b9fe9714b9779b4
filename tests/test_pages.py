"""
Tests for the server-rendered screens and their form actions
"""
import pytest
from services.job_store import JobStoreError


@pytest.mark.integration
class TestDashboardPage:
    """Tests for /dashboard"""

    def test_index_redirects_to_dashboard(self, client):
        """Test that / lands on the dashboard"""
        response = client.get('/')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/dashboard')

    def test_selected_day_jobs(self, client, seeded_app_store):
        """Test that the jobs on the chosen day are listed"""
        html = client.get('/dashboard?date=2024-05-15').get_data(as_text=True)
        assert 'Jobs on 5/15/2024' in html
        assert '12 Elm Street, Springfield' in html
        assert 'May 2024' in html
        assert 'class="inline-block w-8 h-8 leading-8 highlight' in html

    def test_day_without_jobs(self, client, seeded_app_store):
        """Test the empty message"""
        html = client.get('/dashboard?date=2024-05-16').get_data(as_text=True)
        assert 'No jobs scheduled for this date.' in html

    def test_bad_date_falls_back_to_today(self, client):
        """Test that a malformed date still renders the page"""
        assert client.get('/dashboard?date=yesterday').status_code == 200

    def test_job_modal(self, client, seeded_app_store):
        """Test that the details modal opens for ?job="""
        html = client.get('/dashboard?date=2024-05-20&job=sample-sod-3').get_data(as_text=True)
        assert 'Jordan Reyes' in html
        assert 'Mark as Completed' in html
        assert 'View in Google Maps' in html

    def test_load_error(self, app, client, monkeypatch):
        """Test that a failing store shows the load error"""
        def fail(*args, **kwargs):
            raise JobStoreError("disk unavailable")

        monkeypatch.setattr(app.extensions['job_store'], 'fetch_jobs', fail)
        html = client.get('/dashboard').get_data(as_text=True)
        assert 'Failed to load jobs. Please try again later.' in html


@pytest.mark.integration
class TestDashboardActions:
    """Tests for the dashboard form posts"""

    def test_complete_keeps_modal_open(self, client, seeded_app_store):
        """Test that completing redirects back to the same job and day"""
        response = client.post('/dashboard/jobs/sample-sod-3/complete', data={'date': '2024-05-20'})

        assert response.status_code == 302
        assert 'job=sample-sod-3' in response.headers['Location']
        assert 'date=2024-05-20' in response.headers['Location']

        job = seeded_app_store.get_job('sample-sod-3')
        assert job['completed'] is True
        assert job['date'] == '2024-05-20'

    def test_complete_unknown_job_flashes(self, client):
        """Test that an unknown job is reported, not raised"""
        response = client.post('/dashboard/jobs/missing/complete', follow_redirects=True)
        assert response.status_code == 200
        assert 'Job not found.' in response.get_data(as_text=True)

    def test_toggle_blocked(self, client, seeded_app_store):
        """Test that blocking from the dashboard marks the tile blocked"""
        response = client.post('/dashboard/blocked/2024-05-17', follow_redirects=True)
        html = response.get_data(as_text=True)

        assert 'Fri May 17 2024 blocked.' in html
        assert 'leading-8 blocked' in html
        with client.session_transaction() as session:
            assert session['blocked_dates'] == ['2024-05-17']

    def test_toggle_blocked_bad_day(self, client):
        """Test that a malformed day is flashed as an error"""
        response = client.post('/dashboard/blocked/someday', follow_redirects=True)
        assert 'YYYY-MM-DD' in response.get_data(as_text=True)


@pytest.mark.integration
class TestManagementPage:
    """Tests for /management"""

    def test_active_jobs(self, client, seeded_app_store):
        """Test the active list, toggle and completed value"""
        html = client.get('/management').get_data(as_text=True)
        assert 'Front lawn mow' in html
        assert 'Autumn cleanup' not in html
        assert 'Show Completed Jobs' in html
        assert 'Total value of completed jobs: $200.00' in html

    def test_completed_jobs(self, client, seeded_app_store):
        """Test the completed list"""
        html = client.get('/management?show=completed').get_data(as_text=True)
        assert 'Autumn cleanup' in html
        assert 'Show Active Jobs' in html

    def test_empty_list(self, client):
        """Test the empty message"""
        html = client.get('/management').get_data(as_text=True)
        assert 'No active jobs found.' in html

    def test_invoice_modal(self, client, seeded_app_store):
        """Test that the invoice preview links to the PDF"""
        html = client.get('/management?show=completed&job=sample-cleanup-4&invoice=1').get_data(as_text=True)
        assert 'Download Invoice' in html
        assert '/api/jobs/sample-cleanup-4/invoice.pdf' in html

    def test_mark_done_closes_modal(self, client, seeded_app_store):
        """Test that Mark as Done returns to the plain list"""
        response = client.post('/management/jobs/sample-mow-1/complete')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/management')
        assert seeded_app_store.get_job('sample-mow-1')['completed'] is True

    def test_mark_done_keeps_date(self, client, seeded_app_store):
        """Test that the management write leaves the stored date alone"""
        client.post('/management/jobs/sample-sod-3/complete')
        assert seeded_app_store.get_job('sample-sod-3')['date'] == 'Mon May 20 2024'


@pytest.mark.integration
class TestOverviewPage:
    """Tests for /overview"""

    def test_recent_jobs(self, client, seeded_app_store):
        """Test that recent jobs are listed with last name and address"""
        html = client.get('/overview').get_data(as_text=True)
        assert 'Recent Jobs' in html
        assert 'Reyes - 4 Maple Court, Shelbyville' in html

    def test_no_jobs(self, client):
        """Test the empty message"""
        html = client.get('/overview').get_data(as_text=True)
        assert 'No recent jobs added.' in html

    def test_job_modal(self, client, seeded_app_store):
        """Test that the read-only modal opens"""
        html = client.get('/overview?job=sample-hedge-2').get_data(as_text=True)
        assert 'Hedge trimming' in html
        assert 'Mark as Completed' not in html
