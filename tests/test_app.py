from blood_donation import create_app
from blood_donation.config import TestingConfig
from blood_donation.extensions import scheduler


class RefreshEnabledConfig(TestingConfig):
    ELIGIBILITY_REFRESH_ENABLED = True


def test_second_app_reuses_the_running_refresh_job():
    first = create_app(RefreshEnabledConfig)
    try:
        second = create_app(RefreshEnabledConfig)

        assert second is not first
        assert scheduler.running
        assert [job.id for job in scheduler.get_jobs()] == ['refresh-donor-eligibility']
    finally:
        scheduler.shutdown(wait=False)


def test_refresh_disabled_by_default_in_tests(app):
    assert app.config['ELIGIBILITY_REFRESH_ENABLED'] is False


def test_refresh_eligibility_command(app, make_donor):
    make_donor(eligible=True)

    result = app.test_cli_runner().invoke(args=['refresh-eligibility'])

    assert result.exit_code == 0
    assert '0 donor profiles updated.' in result.output
