"""Tests for the plain-data merge helpers."""

import sparkkit.utils.config_tree as config_tree


class TestDeepMerge:
    """Tests for deep_merge()."""

    def test_nested_keys_merge(self) -> None:
        """Nested mappings merge key by key."""
        result = config_tree.deep_merge(
            {"a": {"x": 1, "y": 2}, "b": 3},
            {"a": {"y": 5}},
        )

        assert result == {"a": {"x": 1, "y": 5}, "b": 3}

    def test_leaf_replaces_mapping(self) -> None:
        """A leaf on the incoming side wins over a mapping."""
        assert config_tree.deep_merge({"a": {"x": 1}}, {"a": None}) == {"a": None}

    def test_mapping_replaces_leaf(self) -> None:
        """A mapping on the incoming side wins over a leaf."""
        assert config_tree.deep_merge({"a": "text"}, {"a": {"x": 1}}) == {"a": {"x": 1}}

    def test_non_mapping_incoming_replaces_base(self) -> None:
        """A non-mapping incoming value is the result."""
        assert config_tree.deep_merge({"a": 1}, [1, 2]) == [1, 2]

    def test_lists_replace(self) -> None:
        """Lists are not concatenated."""
        assert config_tree.deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_not_modified(self) -> None:
        """Neither argument is mutated."""
        base = {"a": {"x": 1}}
        incoming = {"a": {"y": 2}, "b": [1]}

        config_tree.deep_merge(base, incoming)

        assert base == {"a": {"x": 1}}
        assert incoming == {"a": {"y": 2}, "b": [1]}

    def test_result_does_not_share_incoming_containers(self) -> None:
        """Containers from incoming are copied into the result."""
        incoming = {"b": [1], "c": {"d": 1}}

        result = config_tree.deep_merge({}, incoming)
        incoming["b"].append(2)
        incoming["c"]["d"] = 2

        assert result == {"b": [1], "c": {"d": 1}}

    def test_key_order(self) -> None:
        """Base keys keep their order; new keys follow in incoming order."""
        result = config_tree.deep_merge({"b": 1, "a": 2}, {"z": 0, "a": 3})

        assert list(result) == ["b", "a", "z"]


class TestToPlain:
    """Tests for to_plain()."""

    def test_flattens_tree(self) -> None:
        """ConfigTrees become plain dicts."""
        tree = config_tree.ConfigTree({"a": {"b": 1}})

        result = config_tree.to_plain(tree)

        assert result == {"a": {"b": 1}}
        assert type(result) is dict

    def test_flattens_tree_nested_in_dict(self) -> None:
        """Trees nested inside plain mappings are flattened too."""
        result = config_tree.to_plain({"outer": config_tree.ConfigTree({"x": 1})})

        assert result == {"outer": {"x": 1}}
        assert type(result["outer"]) is dict

    def test_leaf_is_copied(self) -> None:
        """Leaf containers are deep-copied."""
        items = [[1]]

        result = config_tree.to_plain(items)
        items[0].append(2)

        assert result == [[1]]
