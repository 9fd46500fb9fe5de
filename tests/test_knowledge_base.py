from clinical_intake.models.zones import RedFlagSeverity, ZoneCategory


class TestZoneRegistry:
    def test_tree_is_consistent(self, registry):
        assert registry.validate() == []

    def test_ids_are_unique(self, registry):
        ids = [z.id for z in registry.get_all_zones()]
        assert len(ids) == len(set(ids))
        assert len(registry) == len(ids)

    def test_every_zone_has_both_labels(self, registry):
        for zone in registry.get_all_zones():
            assert zone.label_en
            assert zone.label_ur
            assert zone.label("ur") == zone.label_ur

    def test_parent_child_links_agree(self, registry):
        for zone in registry.get_all_zones():
            for child in registry.get_children(zone.id):
                assert child.parent_id == zone.id
            if zone.parent_id:
                assert zone.id in registry.get_parent(zone.id).children

    def test_terminal_zones_have_no_children(self, registry):
        terminals = registry.get_terminal_zones()
        assert terminals
        for zone in terminals:
            assert not registry.has_children(zone.id)
            assert isinstance(zone.clinical.common_diagnoses, list)
            assert isinstance(zone.clinical.red_flags, list)

    def test_lookup_miss_returns_none(self, registry):
        assert registry.get_zone("NOT_A_ZONE") is None
        assert registry.get_zone(None) is None
        assert "NOT_A_ZONE" not in registry
        assert registry.get_path("NOT_A_ZONE") == []
        assert registry.get_related_zones("NOT_A_ZONE") == []

    def test_lookup_is_case_insensitive(self, registry):
        assert registry.get_zone("left_precordial").id == "LEFT_PRECORDIAL"

    def test_precordial_zone(self, registry):
        zone = registry.get_zone("LEFT_PRECORDIAL")
        assert zone.category == ZoneCategory.CHEST
        assert zone.clinical.priority == 10
        assert any(
            f.severity == RedFlagSeverity.IMMEDIATE and f.condition == "Acute Coronary Syndrome"
            for f in zone.clinical.red_flags
        )

    def test_path_runs_root_to_zone(self, registry):
        path = registry.get_path("LEFT_PRECORDIAL")
        assert path[-1].id == "LEFT_PRECORDIAL"
        assert path[0].parent_id is None
        for parent, child in zip(path, path[1:]):
            assert child.parent_id == parent.id

    def test_related_zones_resolve(self, registry):
        related = [z.id for z in registry.get_related_zones("LEFT_PRECORDIAL")]
        assert "LEFT_ARM" in related
        assert "JAW_LEFT" in related

    def test_search_matches_aliases(self, registry):
        results = [z.id for z in registry.search_zones("heart")]
        assert "LEFT_PRECORDIAL" in results
        assert registry.search_zones("   ") == []

    def test_zone_tree_depths(self, registry):
        roots = registry.get_zone_tree()
        assert roots
        for root in roots:
            assert root.depth == 0
            assert root.path == [root.id]
            for child in root.children:
                assert child.depth == 1
                assert child.path[:-1] == root.path
