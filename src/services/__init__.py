"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.

This layer contains:
- SeasonRegistrar: insert-if-absent season registration
- EpisodeReconciler: merge of a catalog snapshot into stored episodes
- MissingEpisodesQuery: aired episodes without file, paginated and sorted
- EpisodeService: explicit episode lookups and operations
- SeriesService: tracked series and sync orchestration
"""
