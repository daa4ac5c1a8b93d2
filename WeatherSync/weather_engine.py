"""Keeps the shared weather record in step with the external calendar."""
import logging
from typing import Callable, List, Optional

from authority import AuthorityGate
from change_detector import Transition, classify, is_cosmetic
from climate import BIOME_MAPPINGS, DEFAULT_PARAMETERS, ClimateParameters
from time_snapshot import SnapshotState, TimeSnapshot, is_valid, snapshot_state
from weather_generator import WeatherGeneratorBase
from weather_record import WeatherRecord
from weather_store import WeatherStore, WindowPosition


Listener = Callable[[], None]


class WeatherEngine:
    """
    Owns this instance's view of the shared weather record.

    Only the authoritative instance generates and commits records. Every
    other instance adopts whatever it reads from the store and at most
    refreshes the time of day locally. Time updates must be delivered one
    at a time; the engine does no locking of its own.
    """

    def __init__(
        self,
        store: WeatherStore,
        generator: WeatherGeneratorBase,
        authority: AuthorityGate
    ):
        """
        Initialize the engine. Call initialize() before feeding time updates.

        Args:
            store: Adapter over the shared settings store
            generator: Weather content generator
            authority: Decides whether this instance may write
        """
        self.store = store
        self.generator = generator
        self.authority = authority

        self._record: Optional[WeatherRecord] = None
        self._listeners: List[Listener] = []

    @property
    def current_record(self) -> Optional[WeatherRecord]:
        return self._record

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback fired whenever the presentation should re-read state.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def initialize(self) -> Optional[WeatherRecord]:
        """
        Load the persisted record, seeding a first one if this instance is authoritative.

        Returns:
            The adopted record, or None if an observer found the store empty

        Raises:
            StoreReadError: If the store could not be read
            StoreWriteError: If the seeded record could not be committed
            WeatherGeneratorError: If seeding failed
        """
        logging.info("Initializing weather engine")
        record = self.store.read()

        if record is not None:
            logging.info("Using saved weather data")
            self._record = record
        elif self.authority.is_authoritative():
            logging.info("No saved weather data - generating weather")
            self._commit(self._generate(DEFAULT_PARAMETERS, None, None))
        else:
            logging.info("No saved weather data - waiting for the authoritative instance")

        self._notify()
        return self._record

    def on_store_update(self) -> Optional[WeatherRecord]:
        """Re-read the shared record after another instance committed one."""
        record = self.store.read()
        if record is None:
            logging.debug("Store update carried no weather record, keeping current one")
            return self._record

        logging.info("Adopting weather record from store")
        self._record = record
        self._notify()
        return self._record

    def on_time_update(self, incoming: Optional[TimeSnapshot]) -> None:
        """
        React to a calendar tick.

        A new calendar date makes the authoritative instance generate and
        commit a new record. Anything else only refreshes the local time.

        Raises:
            StoreReadError: If the climate parameters could not be read
            StoreWriteError: If the new record could not be committed
            WeatherGeneratorError: If generation failed
        """
        if incoming is None:
            return

        previous = self._record.snapshot if self._record is not None else None
        transition = classify(previous, incoming)

        if transition is Transition.MATERIAL and self.authority.is_authoritative():
            logging.info(f"Date has changed to {incoming.day}/{incoming.month}/{incoming.year}")
            self._commit(self._next_record(incoming))
        else:
            if transition is Transition.MATERIAL:
                logging.debug("Date has changed, waiting for the authoritative instance to commit")
            elif is_cosmetic(previous, incoming):
                logging.debug(f"Time of day is now {incoming.minute}:{incoming.second:02d}")
            # A partial snapshot would make the next valid tick look like a date change
            if self._record is not None and is_valid(incoming):
                self._record = self._record.with_snapshot(incoming)

        self._notify()

    def _next_record(self, incoming: TimeSnapshot) -> WeatherRecord:
        if self._record is None:
            logging.info("No weather record yet - generating weather")
            return self._generate(self.current_parameters(), None, incoming)

        if snapshot_state(self._record.snapshot) is not SnapshotState.COMPLETE:
            # First observation only dates the existing record
            logging.info("Attaching first calendar date to existing weather")
            return self._record.with_snapshot(incoming)

        logging.info("Generate new weather")
        return self._generate(self.current_parameters(), self._record, incoming)

    def manual_regenerate(self, params: ClimateParameters) -> WeatherRecord:
        """
        Force a new record from the given climate selections, whatever the date.

        Raises:
            UnauthorizedMutationError: If this instance is not authoritative
            IncompleteParametersError: If climate, humidity or season is missing
            StoreWriteError: If the new record could not be committed
            WeatherGeneratorError: If generation failed
        """
        self.authority.require_authority("regenerate weather")
        params.require_complete()

        snapshot = self._record.snapshot if self._record is not None else None
        logging.info(
            f"Manual regeneration: climate={params.climate.name} "
            f"humidity={params.humidity.name} season={params.season.name}"
        )
        self._commit(self._generate(params, self._record, snapshot))
        self._notify()
        return self._record

    def update_parameters(self, climate=None, humidity=None, season=None) -> ClimateParameters:
        """
        Store new climate selections. Doesn't regenerate.

        Returns:
            The selections now in effect
        """
        self.authority.require_authority("change climate selections")
        self.store.write_parameters(ClimateParameters.from_values(climate, humidity, season))
        return self.current_parameters()

    def select_biome(self, biome: str) -> ClimateParameters:
        """
        Apply a biome preset: stores the biome and its climate and humidity.

        Raises:
            ValueError: If the biome is unknown
        """
        self.authority.require_authority("change climate selections")
        mapping = BIOME_MAPPINGS.get(biome)
        if mapping is None:
            raise ValueError(f"Unknown biome: {biome}")

        self.store.write_biome(biome)
        self.store.write_parameters(ClimateParameters(mapping.climate, mapping.humidity, None))
        logging.info(f"Biome set to {biome}")
        return self.current_parameters()

    @property
    def window_position(self) -> WindowPosition:
        return self.store.read_window_position()

    def set_window_position(self, left: int, top: int) -> WindowPosition:
        position = WindowPosition(left=int(left), top=int(top))
        self.store.write_window_position(position)
        return position

    def current_parameters(self) -> ClimateParameters:
        """Stored selections, with anything unset taken from the defaults."""
        return self.store.read_parameters().merged_with(DEFAULT_PARAMETERS)

    def _generate(
        self,
        params: ClimateParameters,
        seed: Optional[WeatherRecord],
        snapshot: Optional[TimeSnapshot]
    ) -> WeatherRecord:
        content = self.generator.generate(
            params.climate,
            params.humidity,
            params.season,
            seed.content if seed is not None else None,
        )
        return WeatherRecord(content=content, snapshot=snapshot)

    def _commit(self, record: WeatherRecord) -> None:
        # The held record is only replaced once the write has gone through
        self.authority.require_authority("commit weather")
        self.store.write(record)
        self._record = record
        logging.info("Weather record committed")
