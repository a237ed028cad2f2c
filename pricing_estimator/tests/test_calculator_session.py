"""
Tests: calculator session — form updates, validation, pricing, store wiring.

Run with:
    pytest pricing_estimator/tests/test_calculator_session.py -v
"""

from pricing_estimator.defaults import DEFAULT_VARIABLES
from pricing_estimator.models.enums import VariableType
from pricing_estimator.models.schemas import ConfigSnapshot, PricingVariable, evolve
from pricing_estimator.orchestration.calculator_session import (
    CalculatorSession,
    blank_industry_options,
)


class TestInitialState:
    def test_defaults_price_bookkeeping_only(self, session):
        assert session.error is None
        assert session.total == 3200
        assert session.form_data.selected_services == frozenset({"bookkeeping"})

    def test_default_industry_answers_all_no(self, session):
        assert session.form_data.industry == "consulting"
        assert session.form_data.industry_options == {
            "fixed-price-contracts": False,
            "international-clients": False,
        }

    def test_formatted_total(self, session):
        assert session.formatted_total == "3\u00a0200\u00a0kr"

    def test_result_surface(self, session):
        result = session.result
        assert result.total == 3200
        assert result.error is None
        assert result.form_data is session.form_data

    def test_blank_options_for_unknown_industry(self, snapshot):
        assert blank_industry_options(snapshot, "space-mining") == {}


class TestFormUpdates:
    def test_salary_scenario(self, session):
        session.set_form_data(employees=5, selected_services=["salary"])
        assert session.total == 1900

    def test_premium_scenario(self, session):
        session.set_form_data(transactions=100, is_premium=True)
        assert session.total == 8200

    def test_update_replaces_snapshot(self, session):
        before = session.form_data
        session.set_form_data(employees=3)
        assert session.form_data is not before
        assert before.employees == 1
        assert session.form_data.employees == 3

    def test_mapping_and_keyword_updates_merge(self, session):
        session.set_form_data({"employees": 4}, transactions=10)
        assert session.form_data.employees == 4
        assert session.form_data.transactions == 10

    def test_industry_change_resets_answers(self, session):
        session.set_industry_option("international-clients", True)
        session.set_form_data(industry="tech")
        assert session.form_data.industry_options == {
            "has-stock-options": False,
            "has-investors": False,
        }

    def test_same_industry_keeps_answers(self, session):
        session.set_industry_option("international-clients", True)
        session.set_form_data(industry="consulting")
        assert session.form_data.industry_options["international-clients"] is True

    def test_industry_answer_reprices(self, session):
        session.set_industry_option("fixed-price-contracts", True)
        assert session.total == 3520  # 3200 × 1.1

    def test_unknown_industry_prices_neutral(self, session):
        session.set_form_data(industry="space-mining")
        assert session.form_data.industry_options == {}
        assert session.total == 3200

    def test_toggle_service(self, session):
        session.toggle_service("salary")
        assert session.form_data.selected_services == frozenset({"bookkeeping", "salary"})
        session.toggle_service("bookkeeping")
        assert session.form_data.selected_services == frozenset({"salary"})
        assert session.total == 900


class TestValidationInSession:
    def test_out_of_range_zeroes_total(self, session):
        session.set_form_data(employees=0)
        assert session.error == "Number of employees must be at least 1"
        assert session.total == 0
        assert session.breakdown().total == 0

    def test_fix_restores_total(self, session):
        session.set_form_data(employees=0)
        session.set_form_data(employees=1)
        assert session.error is None
        assert session.total == 3200

    def test_empty_field_message(self, session):
        session.set_form_data(revenue="")
        assert session.error == "Please fill in all required fields"
        assert session.total == 0

    def test_wrong_type_is_invalid_input(self, session):
        before = session.form_data
        session.set_form_data(employees="many")
        assert session.error == "Invalid input"
        assert session.total == 0
        assert session.form_data is before

    def test_clear_error(self, session):
        session.set_form_data(employees=0)
        session.clear_error()
        assert session.error is None


class TestVariableFields:
    def _with_seats(self, seats_variable):
        return DEFAULT_VARIABLES + (seats_variable,)

    def test_new_variable_adds_field_with_default(self, store, session, seats_variable):
        store.publish(variables=self._with_seats(seats_variable))
        assert session.form_data.value_of("seats") == 0
        assert session.total == 3200

    def test_text_variable_defaults_to_empty_string(self, store, session):
        notes = PricingVariable(id="var-notes", tag="notes", type=VariableType.TEXT)
        store.publish(variables=DEFAULT_VARIABLES + (notes,))
        assert session.form_data.value_of("notes") == ""

    def test_variable_value_prices_its_service(self, store, session, seats_variable):
        store.publish(variables=self._with_seats(seats_variable))
        session.set_form_data(seats=3)
        assert session.total == 3500

    def test_value_survives_remove_and_readd(self, store, session, seats_variable):
        store.publish(variables=self._with_seats(seats_variable))
        session.set_form_data(seats=3)

        store.publish(variables=DEFAULT_VARIABLES)
        assert session.form_data.value_of("seats") == 3
        assert session.total == 3200

        store.publish(variables=self._with_seats(seats_variable))
        assert session.form_data.value_of("seats") == 3
        assert session.total == 3500

    def test_existing_value_not_overwritten_by_default(self, store, seats_variable):
        session = CalculatorSession(store.snapshot)
        session.set_form_data(seats=7)
        session.apply_config(evolve(store.snapshot, variables=self._with_seats(seats_variable)))
        assert session.form_data.value_of("seats") == 7
        assert session.total == 3200 + 700


class TestStoreWiring:
    def test_publish_reprices_attached_session(self, store, session):
        pricing = store.snapshot.pricing
        store.publish(pricing=pricing.model_copy(update={
            "bookkeeping": evolve(pricing.bookkeeping, base_rate=3000),
        }))
        assert session.config.version == 2
        assert session.total == 4200

    def test_detached_session_keeps_config(self, store, session):
        session.detach()
        store.publish(variables=())
        assert session.config.version == 1

    def test_attach_adopts_newer_snapshot(self, store):
        session = CalculatorSession(ConfigSnapshot(version=0))
        assert session.total == 0
        session.attach(store)
        assert session.config == store.snapshot
        assert session.total == 3200
        session.dispose()

    def test_dispose_unsubscribes(self, store):
        session = CalculatorSession.from_store(store)
        session.dispose()
        store.publish(variables=())
        assert session.config.version == 1


class TestBoundFields:
    def test_debounced_input_commits_into_session(self, session, scheduler):
        session.toggle_service("salary")
        field = session.bind_field("employees", scheduler=scheduler)
        for text in ["1", "12"]:
            field.handle_input(text)
            scheduler.advance(100)
        assert session.form_data.employees == 1
        scheduler.advance(300)
        assert session.form_data.employees == 12
        assert session.total == 3200 + 650 + 12 * 250

    def test_unparseable_input_keeps_value(self, session, scheduler):
        field = session.bind_field("transactions", scheduler=scheduler)
        field.handle_input("lots")
        scheduler.advance(300)
        assert session.form_data.transactions == 100
        assert session.error is None

    def test_cleared_input_surfaces_required_error(self, session, scheduler):
        field = session.bind_field("revenue", scheduler=scheduler)
        field.handle_input("")
        scheduler.advance(300)
        assert session.error == "Please fill in all required fields"

    def test_external_update_syncs_idle_field(self, session, scheduler):
        field = session.bind_field("employees", scheduler=scheduler)
        session.set_form_data(employees=7)
        assert field.text == "7"

    def test_external_update_does_not_clobber_typing(self, session, scheduler):
        field = session.bind_field("employees", scheduler=scheduler)
        field.handle_input("4")
        session.set_form_data(employees=7)
        assert field.text == "4"
        scheduler.advance(300)
        assert session.form_data.employees == 4

    def test_dispose_cancels_pending_commits(self, session, scheduler):
        field = session.bind_field("employees", scheduler=scheduler)
        field.handle_input("9")
        session.dispose()
        assert scheduler.pending_count == 0
        assert session.form_data.employees == 1

    def test_unbind_field(self, session, scheduler):
        field = session.bind_field("employees", scheduler=scheduler)
        field.handle_input("9")
        session.unbind_field("employees")
        scheduler.run_all()
        assert session.form_data.employees == 1

    def test_variable_field_binding(self, store, session, scheduler, seats_variable):
        store.publish(variables=DEFAULT_VARIABLES + (seats_variable,))
        field = session.bind_field("seats", scheduler=scheduler)
        assert field.text == "0"
        field.handle_input("2")
        scheduler.advance(300)
        assert session.total == 3400

    def test_fields_debounce_independently(self, session, scheduler):
        session.toggle_service("salary")
        employees = session.bind_field("employees", scheduler=scheduler)
        transactions = session.bind_field("transactions", scheduler=scheduler)

        employees.handle_input("3")
        scheduler.advance(100)
        transactions.handle_input("2")
        scheduler.advance(100)
        employees.handle_input("30")
        transactions.handle_input("20")
        assert scheduler.pending_count == 2

        scheduler.advance(299)
        assert session.form_data.employees == 1
        assert session.form_data.transactions == 100

        scheduler.advance(1)
        assert session.form_data.employees == 30
        assert session.form_data.transactions == 20
        assert session.total == (650 + 30 * 250) + (2000 + 20 * 12)


class TestIndustryQuestionEdits:
    def test_answers_follow_current_industry_questions(self, session, editor):
        session.set_industry_option("fixed-price-contracts", True)
        session.set_industry_option("international-clients", True)

        editor.begin_industry_edit("consulting")
        editor.remove_question("international-clients")
        added = editor.add_question("Do you bill by the hour?")
        editor.save_industry()

        assert session.form_data.industry_options == {
            "fixed-price-contracts": True,
            added.id: False,
        }
        assert session.total == 3520  # 3200 × 1.1

    def test_other_industry_edits_keep_answers(self, session, editor):
        session.set_industry_option("international-clients", True)

        editor.begin_industry_edit("tech")
        editor.add_question()
        editor.save_industry()

        assert session.form_data.industry_options == {
            "fixed-price-contracts": False,
            "international-clients": True,
        }

    def test_industry_removed_from_config_clears_answers(self, store, session):
        session.set_industry_option("international-clients", True)
        industries = {k: v for k, v in store.snapshot.industries.items() if k != "consulting"}
        store.publish(industries=industries)
        assert session.form_data.industry_options == {}
        assert session.total == 3200
