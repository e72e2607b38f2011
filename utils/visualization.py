"""
시각화 모듈: Gantt Chart 및 통계 출력
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.scheduler_base import GanttEntry


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 큐 레벨별 색상 설정
        self.colors = plt.cm.Set2.colors
        self.boost_color = '#D62728'

    def level_color(self, level: int):
        return self.colors[level % len(self.colors)]

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         boost_times: List[int] = None,
                         save_path: str = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            boost_times: 부스트 발생 시각 (점선으로 표시)
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        unique_pids = sorted(set(entry.pid for entry in gantt_data))
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}
        levels = sorted(set(entry.level for entry in gantt_data))

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            y_pos = pid_to_y[entry.pid]

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=self.level_color(entry.level), edgecolor='black', linewidth=0.5)

            # 충분히 긴 경우만 텍스트 표시
            if duration > 1:
                ax.text(entry.start_time + duration/2, y_pos, f'Q{entry.level}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        for boost_time in boost_times or []:
            ax.axvline(boost_time, color=self.boost_color, linestyle='--', linewidth=1)

        # 축 설정
        ax.set_yticks(range(len(unique_pids)))
        ax.set_yticklabels([f'P{pid}' for pid in unique_pids])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        # 범례 추가
        legend_elements = [mpatches.Patch(color=self.level_color(level), label=f'Queue {level}')
                           for level in levels]
        if boost_times:
            legend_elements.append(mpatches.Patch(color=self.boost_color, label='Priority Boost'))
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 시뮬레이션의 결과 리스트
        """
        print("\n" + "="*130)
        print("MLFQ 시뮬레이션 통계")
        print("="*130)
        print(f"{'설정':<40} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} "
              f"{'CPU 이용률(%)':>15} {'문맥전환':>10} {'강등':>8} {'부스트':>8}")
        print("-"*130)

        for result in results:
            stats = result['statistics']
            print(f"{result['algorithm']:<40} "
                  f"{stats['avg_waiting_time']:>12.2f} "
                  f"{stats['avg_turnaround_time']:>12.2f} "
                  f"{stats['avg_response_time']:>12.2f} "
                  f"{stats['cpu_utilization']:>15.2f} "
                  f"{stats['context_switches']:>10} "
                  f"{stats['demotions']:>8} "
                  f"{stats['boosts']:>8}")

        print("="*130 + "\n")

    def print_process_details(self, results: Dict):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            results: 시뮬레이션 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*80}")
        print(f"{'PID':<6} {'초기 큐':>8} {'총 작업':>8} {'시작':>8} {'종료':>8} "
              f"{'대기':>8} {'반환':>8} {'응답':>8}")
        print(f"{'-'*80}")

        for process in sorted(results['processes'], key=lambda p: p.pid):
            print(f"{process.pid:<6} "
                  f"{process.initial_priority:>8} "
                  f"{process.total_work:>8} "
                  f"{process.start_time:>8} "
                  f"{process.finish_time:>8} "
                  f"{process.waiting_time:>8} "
                  f"{process.turnaround_time:>8} "
                  f"{process.response_time:>8}")

        print(f"{'='*80}\n")
