# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for bookmarks and element release."""

import gc
import weakref

import pytest

from html_native import Bookmark, BookmarkRegistry, ChildList, Element


@pytest.fixture
def page():
    """A div holding a heading, some text and a nested section."""
    return Element(
        'div',
        ['h1', 'Welcome'],
        'Hello world',
        ['section', ['p', 'deep']],
    )


class TestBookmarkAccess:
    """Tests for setting and reading bookmarks."""

    def test_set_and_get(self, page):
        """Test a bookmark returns its target."""
        heading = page.children[0]
        assert page.bookmark('heading', heading) is heading
        assert page.bookmark('heading') is heading
        assert str(page.bookmark('heading')) == '<h1>Welcome</h1>'

    def test_unset_name(self, page):
        """Test looking up an unknown name returns None."""
        assert page.bookmark('nothing') is None

    def test_overwrite(self, page):
        """Test setting a name again replaces the entry."""
        page.bookmark('mark', page.children[0])
        page.bookmark('mark', page.children[2])
        assert page.bookmark('mark').name == 'section'

    def test_remove_with_none(self, page):
        """Test passing None removes the bookmark."""
        page.bookmark('mark', page.children[0])
        page.bookmark('mark', None)
        assert page.bookmark('mark') is None

    def test_non_child_target(self, page):
        """Test any element can be bookmarked, not only direct children."""
        deep = page.children[2].children[0]
        page.bookmark('deep', deep)
        deep.children.append('er')
        assert str(page.bookmark('deep')) == '<p>deeper</p>'

    def test_unrelated_target(self, page):
        """Test an element outside the tree can be bookmarked."""
        other = Element('aside')
        page.bookmark('other', other)
        assert page.bookmark('other') is other

    def test_rejects_non_element(self, page):
        """Test only elements can be bookmarked."""
        with pytest.raises(TypeError, match="Can only bookmark elements"):
            page.bookmark('text', 'Hello world')

    def test_fresh_element_has_no_bookmarks(self):
        """Test a new element starts with an empty registry."""
        assert len(Element('div').bookmarks) == 0


class TestBookmarkRelease:
    """Tests for bookmark invalidation."""

    def test_deleted_child(self, page):
        """Test a bookmark to a deleted child resolves to None."""
        page.bookmark('heading', page.children[0])
        assert page.bookmark('heading') is not None
        del page.children[0]
        assert page.bookmark('heading') is None

    def test_deleted_child_still_held_by_caller(self, page):
        """Test release is explicit, not tied to garbage collection."""
        heading = page.children[0]
        page.bookmark('heading', heading)
        page.children.remove(heading)
        assert page.bookmark('heading') is None
        assert heading.name == 'h1'

    @pytest.mark.parametrize('remove', [
        lambda children: children.pop(0),
        lambda children: children.clear(),
        lambda children: children.__setitem__(0, 'replacement'),
        lambda children: children.__delitem__(slice(0, 1)),
    ])
    def test_every_removal_releases(self, page, remove):
        """Test pop, clear, replacement and slice deletion all release."""
        page.bookmark('heading', page.children[0])
        remove(page.children)
        assert page.bookmark('heading') is None

    def test_descendants_released_with_ancestor(self, page):
        """Test removing a subtree invalidates bookmarks inside it."""
        page.bookmark('deep', page.children[2].children[0])
        del page.children[2]
        assert page.bookmark('deep') is None

    def test_whole_children_assignment_releases(self, page):
        """Test replacing all children releases the old ones."""
        page.bookmark('heading', page.children[0])
        page.children = ['new content']
        assert page.bookmark('heading') is None

    def test_still_owned_elsewhere(self, page):
        """Test an element stored twice survives removal of one slot."""
        heading = page.children[0]
        page.children.append(heading)
        page.bookmark('heading', heading)
        del page.children[0]
        assert page.bookmark('heading') is heading

    def test_moved_within_list(self, page):
        """Test storing an element over itself keeps it alive."""
        heading = page.children[0]
        page.bookmark('heading', heading)
        page.children[0] = heading
        assert page.bookmark('heading') is heading

    def test_reinserted_element_is_live_again(self, page):
        """Test storing a detached element again revives its bookmarks."""
        heading = page.children.pop(0)
        page.bookmark('heading', heading)
        assert page.bookmark('heading') is None
        other = Element('div')
        other.children.append(heading)
        assert page.bookmark('heading') is heading
        other.children.clear()
        assert page.bookmark('heading') is None

    def test_other_bookmarks_unaffected(self, page):
        """Test releasing one element leaves other bookmarks alone."""
        page.bookmark('heading', page.children[0])
        page.bookmark('section', page.children[2])
        del page.children[0]
        assert page.bookmark('section') is page.children[1]

    def test_bookmark_does_not_keep_target_alive(self):
        """Test the registry holds no strong reference."""
        holder = Element('div')
        target = Element('span')
        ref = weakref.ref(target)
        holder.bookmark('span', target)
        del target
        gc.collect()
        assert ref() is None
        assert holder.bookmark('span') is None


class TestBookmarkReorder:
    """Tests for bookmarks across in-place reordering."""

    @pytest.fixture
    def pair(self):
        page = Element('div', ['h1', 'a'], ['p', 'b'])
        page.bookmark('h', page.children[0])
        page.bookmark('p', page.children[1])
        return page

    def test_reverse(self, pair):
        """Test reverse() keeps every bookmark."""
        heading = pair.children[0]
        pair.children.reverse()
        assert str(pair) == '<div><p>b</p><h1>a</h1></div>'
        assert pair.bookmark('h') is heading
        assert pair.bookmark('p') is pair.children[0]

    def test_swap(self, pair):
        """Test swapping two entries by index keeps both bookmarks."""
        children = pair.children
        children[0], children[1] = children[1], children[0]
        assert str(pair) == '<div><p>b</p><h1>a</h1></div>'
        assert pair.bookmark('h') is children[1]
        assert pair.bookmark('p') is children[0]

    def test_sort(self, pair):
        """Test sort() keeps every bookmark."""
        pair.children.sort(key=lambda element: element.name, reverse=True)
        assert [c.name for c in pair.children] == ['p', 'h1']
        assert pair.bookmark('h') is pair.children[1]

    def test_move_through_pop_and_insert(self, pair):
        """Test a pop followed by re-insertion leaves the bookmark live."""
        heading = pair.children.pop(0)
        pair.children.append(heading)
        assert pair.bookmark('h') is heading


class TestBookmarkSharedElements:
    """Tests for elements stored under more than one parent."""

    def test_shared_descendant_survives_removal_of_one_parent(self):
        """Test an element still reachable through another parent stays live."""
        shared = Element('span', 'x')
        root = Element('div', ['section', shared], ['aside', shared])
        root.bookmark('s', shared)
        del root.children[0]
        assert str(root) == '<div><aside><span>x</span></aside></div>'
        assert root.bookmark('s') is shared
        del root.children[0]
        assert root.bookmark('s') is None

    def test_free_standing_list_keeps_entries_live(self):
        """Test elements in a ChildList not owned by any element are live."""
        fragment = ChildList([['a']])
        holder = Element('div')
        holder.bookmark('a', fragment[0])
        assert holder.bookmark('a') is fragment[0]

    def test_replaced_children_list_no_longer_owns(self):
        """Test a list swapped out by whole assignment stops owning."""
        page = Element('div', ['h1'])
        deep = page.children[0]
        page.bookmark('h', deep)
        page.children = ChildList(['text'])
        assert page.bookmark('h') is None
        assert page.children.owner is page


class TestBookmarkRegistry:
    """Tests for Bookmark and BookmarkRegistry directly."""

    def test_handle(self):
        """Test a handle follows its target's attachment."""
        parent = Element('div', ['p'])
        target = parent.children[0]
        handle = Bookmark(target)
        assert handle.alive
        assert handle.resolve() is target
        parent.children.clear()
        assert not handle.alive
        assert 'released' in repr(handle)

    def test_root_is_always_attached(self):
        """Test an element never stored anywhere counts as attached."""
        assert Element('div').attached

    def test_registry_names_skip_released(self):
        """Test names() lists live bookmarks only."""
        parent = Element('div', ['a'], ['b'])
        registry = BookmarkRegistry()
        registry.set('live', parent.children[0])
        registry.set('dead', parent.children[1])
        del parent.children[1]
        assert registry.names() == ['live']
        assert 'live' in registry
        assert 'dead' not in registry
        assert list(registry) == ['live']

    def test_collected_entry_dropped_on_lookup(self):
        """Test an entry whose target was collected is removed."""
        registry = BookmarkRegistry()
        target = Element('a')
        registry.set('a', target)
        del target
        gc.collect()
        assert registry.get('a') is None
        assert 'a' not in registry._bookmarks
