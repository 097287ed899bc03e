import matplotlib.pyplot as plt
from collections import deque

from .settings import Settings as st
from .ui import UI


class MissRatio:
    """Cache Miss Ratio over the last memory accesses.

    Registered as a Simulator observer, it keeps a sliding window of the
    last 'window' elementary accesses (by default as many as lines in the
    cache) and, after each access, records the miss ratio within the window
    and the running miss ratio since the start of the trace."""
    name = 'Cache Miss Ratio'
    title = 'CMR'
    subtit = 'lower is better'
    xlab = 'Time [elementary accesses]'
    ylab = 'Cache Miss Ratio [%]'

    def __init__(self, config, window=None):
        if window is None:
            window = config.total_lines
        if window < 1:
            raise ValueError('miss ratio window must be at least 1')
        self.config = config
        self.window_size = window
        self.time_window = deque()
        self.window_misses = 0
        self.total_misses = 0
        self.accesses = 0
        self.miss_ratio = [] # windowed, one entry per access
        self.cumulative = [] # since the start, one entry per access
        return

    def __call__(self, record, outcomes):
        for outcome in outcomes:
            self.probe(outcome.is_miss)

    def probe(self, miss):
        """queue one access into the time window and commit its ratios"""
        self.time_window.append(miss)
        self.window_misses += miss
        self.total_misses += miss
        self.accesses += 1
        while len(self.time_window) > self.window_size:
            self.window_misses -= self.time_window.popleft()

        self.miss_ratio.append(100*self.window_misses / len(self.time_window))
        self.cumulative.append(100*self.total_misses / self.accesses)
        return

    def to_dict(self):
        return {
            'code' : 'CMR',
            'window' : self.window_size,
            'miss_ratio' : self.miss_ratio,
            'cumulative' : self.cumulative,
        }

    def to_plot(self, mpl_axes, trace_name=None):
        Y = self.miss_ratio
        X = range(len(Y))
        mpl_axes.plot(X, Y, zorder=2, color=st.Plot.miss_color,
                      linewidth=st.Plot.p_lw,
                      label=f'last {self.window_size} accesses')
        mpl_axes.plot(X, self.cumulative, zorder=3,
                      color=st.Plot.evict_color, linewidth=st.Plot.p_lw,
                      linestyle='--', label='since start')

        # set plot limits
        X_pad = 0.5
        mpl_axes.set_xlim(-X_pad, max(len(Y)-1, 0)+X_pad)
        mpl_axes.set_ylim(-0.5, 100.5)

        # set grid
        for ax,ga,gs,gw in zip(('x', 'y'), st.Plot.grid_alpha,
                               st.Plot.grid_style, st.Plot.grid_width):
            mpl_axes.grid(axis=ax, which='both', zorder=1, alpha=ga,
                          linestyle=gs, linewidth=gw)

        # insert text box with the average
        if len(Y) > 0:
            avg = sum(Y)/len(Y)
            final = self.cumulative[-1]
            text = UI.columns([['Avg', 'Final'],
                               [f'{avg:.2f}%', f'{final:.2f}%']],
                              sep=': ', cols_align='lr', get_str=True)
            mpl_axes.text(0.98, 0.98, text, transform=mpl_axes.transAxes,
                          ha='right', va='top', zorder=1000,
                          bbox=dict(facecolor=st.Plot.tbox_bg,
                                    edgecolor=st.Plot.tbox_border,
                                    boxstyle="square,pad=0.2"),
                          fontdict=dict(family=st.Plot.tbox_font,
                                        size=st.Plot.tbox_font_size))

        # set labels
        mpl_axes.set_xlabel(self.xlab)
        mpl_axes.set_ylabel(self.ylab)
        mpl_axes.legend(loc='lower right', fontsize=8)

        # title and bg color
        title_string = self.title
        if trace_name:
            title_string += f': {trace_name}'
        title_string += f' ({self.subtit})'
        mpl_axes.set_title(title_string, fontsize=10,
                           pad=st.Plot.img_title_vpad)
        mpl_axes.patch.set_facecolor(st.Plot.bg_color)
        return

    def figure(self, trace_name=None):
        fig,mpl_axes = plt.subplots(figsize=(st.Plot.width, st.Plot.height))
        self.to_plot(mpl_axes, trace_name=trace_name)
        return fig
