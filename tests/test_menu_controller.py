from employee_portal.controllers.menu_controller import MENU_TEXT, run_command, run_menu
from employee_portal.models.errors import WriteFailure
from employee_portal.services.display_formatter import NO_RECORDS_MESSAGE


def test_menu_dispatches_until_exit(make_service, output):
    service = make_service("9", "6", "7", "6")

    run_menu(service, service.reader, output.append)

    assert output.count(MENU_TEXT) == 3
    assert "Invalid option." in output
    assert NO_RECORDS_MESSAGE in output
    assert output[-1] == "Shutting down MongoDB client..."


def test_menu_ends_on_end_of_input(make_service, output):
    service = make_service()
    run_menu(service, service.reader, output.append)
    assert output[-1] == "Shutting down MongoDB client..."


def test_menu_reports_errors_and_keeps_running(make_service, store, output):
    service = make_service("1", "not-an-email", "1", "a@b.com", "A", "Eng", "10", "Go", "2024-01-01", "7")

    run_menu(service, service.reader, output.append)

    assert "Email is not valid. Please enter valid Email ID :)" in output
    assert "Employee added." in output
    assert store.count() == 1


def test_cancel_mid_command_returns_to_menu(make_service, output):
    # Input ends while the add command is waiting for a name
    service = make_service("1", "a@b.com")
    run_menu(service, service.reader, output.append)
    assert "Cancelled." in output


def test_run_command_reports_store_failures(output):
    def failing():
        raise WriteFailure()

    run_command(failing, output.append)

    assert output == [WriteFailure.default_message]


def test_run_command_hides_unexpected_errors(output, caplog):
    def broken():
        raise ValueError("internal detail 65a1b2c3")

    run_command(broken, output.append)

    assert output == ["An unexpected error occurred. The command was not completed."]
    assert "internal detail" in caplog.text
