"""Tests for deck-level synergy detection."""

from deck_assistant.contracts import SynergyContract
from deck_assistant.models.synergy import SynergyRelation, SynergyRole, Theme, ThemeKind
from deck_assistant.synergy.detector import SynergyDetector, analyze_synergies

TOKEN_TEXT = "Create a 1/1 white Soldier creature token."
ANTHEM_TEXT = "Creature tokens you control get +1/+1."


def token_deck(make_card, build_deck_list):
    makers = [
        (4, make_card(f"Token Maker {i}", "Sorcery", "{1}{W}", 2.0, TOKEN_TEXT))
        for i in range(4)
    ]
    anthems = [
        (2, make_card(f"Anthem {i}", "Enchantment", "{2}{W}", 3.0, ANTHEM_TEXT))
        for i in range(2)
    ]
    lifegain = [
        (4, make_card(f"Healer {i}", "Instant", "{W}", 1.0, "You gain 3 life."))
        for i in range(3)
    ]
    vanilla = [(4, make_card("Grizzly Bears", "Creature — Bear", "{1}{G}", 2.0))]
    return build_deck_list(makers + anthems + lifegain + vanilla, name="Soldiers")


class TestThemeAggregation:
    """Test theme grouping, filtering and roles."""

    def test_primary_theme_and_roles(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        assert matrix.primary_theme == Theme(ThemeKind.TOKENS)
        tokens = matrix.detected_themes[0]
        assert tokens.card_count == 6
        assert tokens.enablers == [f"Token Maker {i}" for i in range(4)]
        assert tokens.payoffs == ["Anthem 0", "Anthem 1"]
        assert tokens.percentage == 6 / 36

    def test_small_themes_are_dropped(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        themes = [t.theme for t in matrix.detected_themes]
        assert Theme(ThemeKind.LIFEGAIN) not in themes

    def test_min_theme_cards_is_configurable(self, make_card, build_deck_list):
        matrix = SynergyDetector(min_theme_cards=3).analyze(
            token_deck(make_card, build_deck_list)
        )

        themes = [t.theme for t in matrix.detected_themes]
        assert Theme(ThemeKind.LIFEGAIN) in themes
        assert SynergyContract(min_theme_cards=3).validate_output(matrix)[0]

    def test_themes_sorted_by_count(self, make_card, build_deck_list):
        matrix = analyze_synergies(token_deck(make_card, build_deck_list), min_theme_cards=1)

        counts = [t.card_count for t in matrix.detected_themes]
        assert counts == sorted(counts, reverse=True)

    def test_empty_deck(self, build_deck_list):
        matrix = SynergyDetector().analyze(build_deck_list([]))

        assert matrix.detected_themes == []
        assert matrix.primary_theme is None
        assert matrix.stats.synergy_density == 0.0
        assert matrix.stats.theme_coverage == 0.0

    def test_unhydrated_entries_skipped(self, make_card, build_deck_list):
        deck_list = token_deck(make_card, build_deck_list)
        deck_list.add_entry(1, "Mystery Card")

        matrix = SynergyDetector().analyze(deck_list)

        assert "Mystery Card" not in matrix.card_profiles

    def test_profile_role_hint(self, make_card, build_deck_list):
        sword = make_card(
            "Bonesplitter", "Artifact — Equipment", "{1}", 1.0,
            "Equipped creature gets +2/+0.\nEquip {1}",
        )

        matrix = SynergyDetector().analyze(build_deck_list([(1, sword)]))

        assert matrix.card_profiles["Bonesplitter"].role == SynergyRole.SUPPORT


class TestTribalDetection:
    """Test tribal themes within a deck."""

    def test_eight_of_fifty_is_tribal(self, make_card, build_deck_list):
        elves = [(1, make_card(f"Elf {i}", "Creature — Elf")) for i in range(8)]
        golems = [(42, make_card("Golem", "Artifact Creature — Golem"))]

        matrix = SynergyDetector().analyze(build_deck_list(elves + golems))

        tribal = [t for t in matrix.detected_themes if t.theme.is_tribal]
        assert [t.theme for t in tribal] == [Theme.tribal("Elf")]
        assert tribal[0].card_count == 8
        assert tribal[0].support == [f"Elf {i}" for i in range(8)]

    def test_five_of_forty_is_not_tribal(self, make_card, build_deck_list):
        goblins = [(1, make_card(f"Goblin {i}", "Creature — Goblin")) for i in range(5)]
        golems = [(35, make_card("Golem", "Artifact Creature — Golem"))]

        matrix = SynergyDetector().analyze(build_deck_list(goblins + golems))

        assert not any(t.theme.is_tribal for t in matrix.detected_themes)


class TestSynergyEdges:
    """Test edge construction and statistics."""

    def test_relations(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        edge = next(
            e for e in matrix.synergies
            if e.key() == ("Anthem 0", "Token Maker 0")
        )
        assert edge.card_a == "Token Maker 0"
        assert edge.relation == SynergyRelation.ENABLES
        assert edge.strength == 0.5
        assert edge.themes == [Theme(ThemeKind.TOKENS)]
        assert "Tokens" in edge.reason

        between_makers = next(
            e for e in matrix.synergies
            if e.key() == ("Token Maker 0", "Token Maker 1")
        )
        assert between_makers.relation == SynergyRelation.SUPPORTS

    def test_one_edge_per_pair_across_themes(self, make_card, build_deck_list):
        text = "Create a 1/1 white Soldier creature token. You gain 1 life."
        cards = [(1, make_card(f"Card {i}", "Sorcery", "{W}", 1.0, text)) for i in range(5)]

        matrix = SynergyDetector().analyze(build_deck_list(cards))

        assert len(matrix.detected_themes) == 2
        assert len(matrix.synergies) == 10
        assert all(e.themes == [matrix.detected_themes[0].theme] for e in matrix.synergies)

    def test_orphans_and_hubs_partition_profiles(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        is_valid, errors = SynergyContract().validate_output(matrix)
        assert is_valid, errors
        assert "Grizzly Bears" in matrix.stats.orphan_cards
        assert "Healer 0" in matrix.stats.orphan_cards
        assert len(matrix.stats.hub_cards) == 5
        assert all(isinstance(name, str) for name in matrix.stats.hub_cards)
        hub, count = matrix.hub_edge_counts()[0]
        assert hub == matrix.stats.hub_cards[0]
        assert count == 5
        assert matrix.to_dict()["stats"]["hub_cards"] == matrix.stats.hub_cards

    def test_statistics(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        stats = matrix.stats
        assert stats.total_synergies == 15
        assert stats.synergy_density == 15 / 45
        assert stats.theme_coverage == 9 / 10

    def test_observations(self, make_card, build_deck_list):
        matrix = SynergyDetector().analyze(token_deck(make_card, build_deck_list))

        assert matrix.observations[0].startswith("Primary theme: Tokens (6 cards")
        assert any("Healer 0" in o for o in matrix.observations)

    def test_keyword_distribution(self, make_card, build_deck_list):
        cards = [
            (1, make_card("Serra Angel", "Creature — Angel", oracle_text="Flying, vigilance")),
            (1, make_card("Wind Drake", "Creature — Drake", oracle_text="Flying")),
        ]

        matrix = SynergyDetector().analyze(build_deck_list(cards))

        assert matrix.stats.keyword_distribution == {"Flying": 2, "Vigilance": 1}

    def test_to_dict(self, make_card, build_deck_list):
        data = SynergyDetector().analyze(token_deck(make_card, build_deck_list)).to_dict()

        assert data["primary_theme"] == "Tokens"
        assert data["stats"]["total_synergies"] == 15
