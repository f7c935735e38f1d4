"""
JavaScript evaluated inside the page

Each script runs as one Locator.evaluate call, so every read is a single
atomic snapshot of the live DOM.
"""


def capture_subtree_js() -> str:
    # Serializes the target and its descendants down to opts.depthLimit levels.
    # Tallies the whole subtree for top-level containers.
    return r"""
(target, opts) => {
  const { depthLimit, testIdAttributes, interactiveTags, textLimit, topLevelTags } = opts;
  const tallyTree = topLevelTags.includes(target.tagName.toLowerCase());
  const interactive = new Set(interactiveTags);

  const isVisible = (el, rect, styles) => (
    styles.display !== 'none' &&
    styles.visibility !== 'hidden' &&
    parseFloat(styles.opacity) > 0 &&
    rect.width > 0 &&
    rect.height > 0
  );

  const directText = (el) => Array.from(el.childNodes)
    .filter((node) => node.nodeType === Node.TEXT_NODE)
    .map((node) => (node.textContent || '').trim())
    .join(' ')
    .trim();

  const testIds = (el) => {
    const found = {};
    for (const attr of testIdAttributes) {
      if (el.hasAttribute(attr)) found[attr] = el.getAttribute(attr) || '';
    }
    return found;
  };

  const describe = (el, level) => {
    const rect = el.getBoundingClientRect();
    const styles = window.getComputedStyle(el);
    const node = {
      tag: el.tagName.toLowerCase(),
      id: el.id || null,
      classes: Array.from(el.classList || []),
      test_ids: testIds(el),
      role: el.hasAttribute('role') ? (el.getAttribute('role') || '') : null,
      has_onclick: el.hasAttribute('onclick'),
      has_contenteditable: el.hasAttribute('contenteditable'),
      direct_text: directText(el),
      text: (el.textContent || '').trim().slice(0, textLimit),
      rect: {
        x: Math.round(rect.x),
        y: Math.round(rect.y),
        width: Math.round(rect.width),
        height: Math.round(rect.height),
      },
      visible: isVisible(el, rect, styles),
      scroll_height: el.scrollHeight,
      client_height: el.clientHeight,
      scroll_width: el.scrollWidth,
      client_width: el.clientWidth,
      child_count: el.children.length,
      children: [],
    };
    if (level < depthLimit) {
      node.children = Array.from(el.children).map((child) => describe(child, level + 1));
    }
    return node;
  };

  const isInteractive = (el) => (
    interactive.has(el.tagName.toLowerCase()) ||
    el.hasAttribute('onclick') ||
    el.hasAttribute('contenteditable') ||
    el.getAttribute('role') === 'button'
  );

  let treeCounts = null;
  if (tallyTree) {
    const counts = {};
    const interactiveCounts = {};
    const stack = [target];
    while (stack.length) {
      const el = stack.pop();
      const tag = el.tagName.toLowerCase();
      counts[tag] = (counts[tag] || 0) + 1;
      if (isInteractive(el)) interactiveCounts[tag] = (interactiveCounts[tag] || 0) + 1;
      for (const child of el.children) stack.push(child);
    }
    const query = testIdAttributes.map((attr) => `[${attr}]`).join(', ');
    treeCounts = {
      counts,
      interactive_counts: interactiveCounts,
      test_id_count: target.querySelectorAll(query).length,
    };
  }

  return { root: describe(target, 0), tree_counts: treeCounts };
}
"""


def ancestor_chain_js() -> str:
    return r"""
(el, opts) => {
  const { limit, testIdAttributes } = opts;
  const chain = [];
  let current = el;

  for (let i = 0; i < limit && current; i++) {
    const rect = current.getBoundingClientRect();
    const computed = window.getComputedStyle(current);
    let testId = null;
    for (const attr of testIdAttributes) {
      if (current.getAttribute(attr)) { testId = current.getAttribute(attr); break; }
    }

    chain.push({
      tagName: current.tagName.toLowerCase(),
      testId,
      classes: typeof current.className === 'string' ? current.className : '',
      rect: {
        x: Math.round(rect.x),
        y: Math.round(rect.y),
        width: Math.round(rect.width),
        height: Math.round(rect.height),
      },
      width: computed.width,
      maxWidth: computed.maxWidth,
      minWidth: computed.minWidth,
      margin: computed.margin,
      marginTop: computed.marginTop,
      marginRight: computed.marginRight,
      marginBottom: computed.marginBottom,
      marginLeft: computed.marginLeft,
      padding: computed.padding,
      display: computed.display,
      overflow: computed.overflow,
      overflowX: computed.overflowX,
      overflowY: computed.overflowY,
      scrollHeight: current.scrollHeight,
      scrollWidth: current.scrollWidth,
      clientHeight: current.clientHeight,
      clientWidth: current.clientWidth,
      border: computed.border,
      borderTop: computed.borderTop,
      borderRight: computed.borderRight,
      borderBottom: computed.borderBottom,
      borderLeft: computed.borderLeft,
      flexDirection: computed.flexDirection,
      justifyContent: computed.justifyContent,
      alignItems: computed.alignItems,
      gap: computed.gap,
      gridTemplateColumns: computed.gridTemplateColumns,
      gridTemplateRows: computed.gridTemplateRows,
      position: computed.position !== 'static' ? computed.position : null,
      zIndex: computed.zIndex !== 'auto' ? computed.zIndex : null,
      transform: computed.transform !== 'none' ? computed.transform : null,
    });

    current = current.parentElement;
  }

  return chain;
}
"""


def element_descriptor_js() -> str:
    return r"""
(element, testIdAttributes) => {
  const tagName = element.tagName.toLowerCase();
  let testId = null;
  for (const attr of testIdAttributes) {
    if (element.getAttribute(attr)) { testId = element.getAttribute(attr); break; }
  }
  const id = element.id ? `#${element.id}` : '';
  const classes = element.className && typeof element.className === 'string'
    ? `.${element.className.split(' ').filter((c) => c).join('.')}`
    : '';
  return { tagName, testId, id, classes };
}
"""
