"""Tests for the active-athlete pointer."""

from personal_training.state import AppState


class TestAppState:
    def test_starts_without_active_athlete(self, athlete_manager):
        state = AppState()
        assert state.active(athlete_manager) is None

    def test_select_and_read_back(self, athlete_manager, carla):
        athlete_manager.add(carla)
        state = AppState()
        state.select(carla)
        assert state.active(athlete_manager).name == "Carla"
        state.select(None)
        assert state.active_athlete_id is None

    def test_first_added_athlete_becomes_active(self, make_athlete):
        state = AppState()
        ana = make_athlete(name="Ana")
        state.on_athlete_added(ana)
        state.on_athlete_added(make_athlete(name="Luis"))
        assert state.active_athlete_id == ana.id

    def test_deleting_active_reassigns_to_first_by_name(self, athlete_manager, make_athlete):
        marta = athlete_manager.add(make_athlete(name="Marta"))
        athlete_manager.add(make_athlete(name="Luis"))
        athlete_manager.add(make_athlete(name="Beatriz"))
        state = AppState()
        state.select(marta)
        athlete_manager.delete(marta.id)
        state.on_athlete_deleted(athlete_manager)
        assert state.active(athlete_manager).name == "Beatriz"

    def test_deleting_other_athlete_keeps_pointer(self, athlete_manager, make_athlete):
        marta = athlete_manager.add(make_athlete(name="Marta"))
        luis = athlete_manager.add(make_athlete(name="Luis"))
        state = AppState()
        state.select(marta)
        athlete_manager.delete(luis.id)
        state.on_athlete_deleted(athlete_manager)
        assert state.active_athlete_id == marta.id

    def test_deleting_last_athlete_clears_pointer(self, athlete_manager, carla):
        athlete_manager.add(carla)
        state = AppState()
        state.select(carla)
        athlete_manager.delete(carla.id)
        state.on_athlete_deleted(athlete_manager)
        assert state.active_athlete_id is None

    def test_stale_pointer_reads_as_none(self, athlete_manager):
        assert AppState(active_athlete_id="desaparecido").active(athlete_manager) is None
