import pytest

from conftest import FakeGit, make_submodule, update_line
from submodule_updater.errors import ToolInvocationError
from submodule_updater.updater import parse_update_output, update_to_latest_commit, update_to_latest_tag


def test_parse_update_output():
    stdout = '\n'.join([
        update_line('libs/a', 'abcdef1234567890'),
        'warning: something unrelated',
        update_line('libs/b', '0123456789abcdef'),
    ])
    updated = parse_update_output(stdout)
    assert [(u.path, u.commit_sha, u.short_commit_sha) for u in updated] == [
        ('libs/a', 'abcdef1234567890', 'abcdef1'),
        ('libs/b', '0123456789abcdef', '0123456'),
    ]


def test_advancer_correlates_updated_paths():
    a, b, c = make_submodule('a'), make_submodule('b'), make_submodule('c')
    git = FakeGit(update_output='\n'.join([
        update_line('b', 'bbbbbbbbbbbbbbbb'),
        update_line('a', 'aaaaaaaaaaaaaaaa'),
    ]))

    result = update_to_latest_commit([a, b, c], git)

    assert git.update_calls == [['a', 'b', 'c']]
    assert [sm.path for sm in result] == ['a', 'b']
    assert a.latest_commit_sha == 'aaaaaaaaaaaaaaaa'
    assert a.latest_short_commit_sha == 'aaaaaaa'
    assert b.latest_commit_sha == 'bbbbbbbbbbbbbbbb'
    assert c.latest_commit_sha == c.previous_commit_sha
    assert c.latest_short_commit_sha == c.previous_short_commit_sha


def test_advancer_empty_output_short_circuits():
    a = make_submodule('a')
    assert update_to_latest_commit([a], FakeGit(update_output='  \n')) == []
    assert a.latest_commit_sha == a.previous_commit_sha


def test_advancer_ignores_unknown_paths():
    a = make_submodule('a')
    git = FakeGit(update_output=update_line('elsewhere', 'ffffffffffffffff'))
    assert update_to_latest_commit([a], git) == []
    assert a.latest_commit_sha == a.previous_commit_sha


def test_tag_snapper_resets_to_latest_tag():
    a = make_submodule('a', tag='v1.0.0')
    b = make_submodule('b', tag='v2.0.0')
    git = FakeGit(latest_tags={'a': 'v1.1.0', 'b': 'v2.3.0'})

    result = update_to_latest_tag([a, b], git)

    assert [(sm.path, sm.latest_tag) for sm in result] == [('a', 'v1.1.0'), ('b', 'v2.3.0')]
    assert sorted(git.reset_calls) == [('a', 'v1.1.0'), ('b', 'v2.3.0')]
    # new records are returned, the inputs stay untouched
    assert a.latest_tag is None


def test_tag_snapper_failure_aborts_run():
    a = make_submodule('a', tag='v1.0.0')
    b = make_submodule('b', tag='v2.0.0')
    git = FakeGit(latest_tags={'a': 'v1.1.0'})

    with pytest.raises(ToolInvocationError, match="'b'"):
        update_to_latest_tag([a, b], git, max_workers=1)
    assert ('b', 'v2.0.0') not in git.reset_calls


def test_tag_snapper_nothing_to_do():
    assert update_to_latest_tag([], FakeGit()) == []


class BrokenResetGit(FakeGit):
    def reset_hard(self, path, ref):
        raise RuntimeError('index.lock exists')


def test_tag_snapper_wraps_unexpected_errors():
    a = make_submodule('a', tag='v1.0.0')
    git = BrokenResetGit(latest_tags={'a': 'v1.1.0'})

    with pytest.raises(ToolInvocationError, match="'a'.*index.lock exists"):
        update_to_latest_tag([a], git)
