#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MLFQ 스케줄러 시뮬레이터 - 메인 실행 파일
큐 레벨 설정 선택 기능 포함
"""

import sys
import os
import re

from core.config import DEFAULT_TIME_QUANTA, BOOST_INTERVAL
from core.mlfq import InvalidConfiguration
from utils.input_parser import InputParser
from utils.visualization import Visualizer
from schedulers.mlfq_scheduler import MLFQScheduler


# 미리 정의된 큐 설정
CONFIGURATIONS = {
    '1': {
        'name': '기본 3단계 (퀀텀 2, 4, 8)',
        'time_quanta': DEFAULT_TIME_QUANTA
    },
    '2': {
        'name': '4단계 (퀀텀 1, 2, 4, 8)',
        'time_quanta': [1, 2, 4, 8]
    },
    '3': {
        'name': '2단계 (퀀텀 4, 16)',
        'time_quanta': [4, 16]
    },
    'custom': {
        'name': '사용자 정의',
        'time_quanta': None
    }
}


def print_banner():
    """배너 출력"""
    print("\n" + "="*80)
    print(" "*25 + "MLFQ 스케줄러 시뮬레이터")
    print("="*80 + "\n")


def print_configuration_menu():
    """큐 설정 선택 메뉴 출력"""
    print("\n" + "="*80)
    print("큐 레벨 설정 선택")
    print("="*80)
    for key, config in CONFIGURATIONS.items():
        print(f"  {key}. {config['name']}")
    print("  all. 미리 정의된 설정 모두 실행")
    print("  0. 종료")
    print("="*80)


def get_user_choice():
    """사용자 선택 입력"""
    while True:
        choice = input("\n선택하세요: ").strip()

        if choice == '0':
            print("\n프로그램을 종료합니다...")
            sys.exit(0)

        if choice in CONFIGURATIONS or choice == 'all':
            return choice

        print("[오류] 잘못된 선택입니다. 다시 시도하세요.")


def read_custom_quanta():
    """사용자 정의 퀀텀 입력 (예: 2,4,8)"""
    while True:
        text = input("\n레벨별 타임 퀀텀을 쉼표로 구분해 입력하세요 (예: 2,4,8): ").strip()
        try:
            quanta = [int(x) for x in text.split(',') if x.strip()]
        except ValueError:
            print("[오류] 정수만 입력하세요.")
            continue
        if quanta:
            return quanta
        print("[오류] 최소 한 개의 퀀텀이 필요합니다.")


def run_simulation(time_quanta, processes, verbose=True):
    """단일 설정으로 시뮬레이션 실행"""
    print(f"\n{'='*80}")
    print(f"실행 중: MLFQ, 퀀텀={time_quanta}, 부스트 주기={BOOST_INTERVAL}")
    print(f"{'='*80}\n")

    try:
        scheduler = MLFQScheduler(processes, num_levels=len(time_quanta),
                                  time_quanta=time_quanta)
    except InvalidConfiguration as e:
        print(f"[오류] 잘못된 설정: {e}")
        return None

    return scheduler.run(verbose=verbose)


def run_all_configurations(processes, verbose=False):
    """미리 정의된 모든 설정 실행"""
    results = []
    keys = [key for key in CONFIGURATIONS if key != 'custom']

    for index, key in enumerate(keys, 1):
        config = CONFIGURATIONS[key]
        print(f"[{index}/{len(keys)}] {config['name']} 실행 중...")
        result = run_simulation(config['time_quanta'], processes, verbose=verbose)
        if result:
            results.append(result)
            print(f"[완료] {config['name']} 완료\n")

    return results


def safe_filename(name):
    """파일명 안전하게 변환"""
    safe = re.sub(r'[^0-9A-Za-z]+', '_', name)
    return safe.strip('_')


def save_results(results, output_dir="simulation_results"):
    """결과 저장"""
    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()

    print("\n" + "="*80)
    print("결과")
    print("="*80 + "\n")
    visualizer.print_statistics_table(results)

    print("Gantt 차트 생성 중...")
    for result in results:
        visualizer.print_process_details(result)
        save_path = os.path.join(output_dir, f"gantt_{safe_filename(result['algorithm'])}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    boost_times=result['boost_times'],
                                    save_path=save_path, show=False)
    print(f"[완료] Gantt 차트가 '{output_dir}/' 디렉토리에 저장되었습니다\n")

    results_file = os.path.join(output_dir, "results.txt")
    save_results_to_file(results, results_file)

    print(f"\n결과가 '{output_dir}/' 디렉토리에 저장되었습니다:")
    print(f"  - Gantt 차트: gantt_*.png")
    print(f"  - 상세 결과: results.txt")
    print("="*80 + "\n")


def save_results_to_file(results, filename):
    """결과를 텍스트 파일로 저장"""
    try:
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("="*120 + "\n")
            f.write("MLFQ 스케줄러 시뮬레이션 결과\n")
            f.write("="*120 + "\n\n")

            for result in results:
                stats = result['statistics']
                f.write(f"설정: {result['algorithm']}\n")
                f.write("-"*120 + "\n")
                f.write(f"평균 대기 {stats['avg_waiting_time']:.2f}, "
                        f"평균 반환 {stats['avg_turnaround_time']:.2f}, "
                        f"평균 응답 {stats['avg_response_time']:.2f}, "
                        f"CPU 이용률 {stats['cpu_utilization']:.2f}%, "
                        f"문맥 교환 {stats['context_switches']}, "
                        f"강등 {stats['demotions']}, 부스트 {stats['boosts']}\n")
                f.write(f"부스트 시각: {result['boost_times']}\n\n")

                f.write(f"{'PID':<6} {'초기 큐':>8} {'총 작업':>8} {'시작':>8} {'완료':>8} "
                        f"{'대기':>8} {'반환':>8}\n")
                for process in sorted(result['processes'], key=lambda p: p.pid):
                    f.write(f"{process.pid:<6} "
                            f"{process.initial_priority:>8} "
                            f"{process.total_work:>8} "
                            f"{process.start_time:>8} "
                            f"{process.finish_time:>8} "
                            f"{process.waiting_time:>8} "
                            f"{process.turnaround_time:>8}\n")

                f.write("\n이벤트 로그:\n")
                for log in result['event_log']:
                    f.write(log + "\n")
                f.write("\n")

        print(f"[완료] 결과가 {filename}에 저장되었습니다")

    except OSError as e:
        print(f"[오류] 결과 저장 실패: {e}")


def select_input_file():
    """입력 파일 선택"""
    print("\n" + "="*80)
    print("입력 파일 선택")
    print("="*80)

    script_dir = os.path.dirname(os.path.abspath(__file__))
    data_dir = os.path.join(script_dir, "data")
    sample_data = os.path.join(data_dir, "sample_processes.txt")

    print("\n[입력 옵션]")
    print("  0. 샘플 데이터 (권장) - sample_processes.txt")
    print("  1. 랜덤 데이터 (자동 생성) - generated_input.txt")
    print("  2. 사용자 정의 데이터 (data/ 디렉토리에서 선택)")
    print("="*80)

    while True:
        choice = input("\n입력 옵션 선택 (0-2): ").strip()

        if choice == '0':
            if os.path.exists(sample_data):
                return sample_data
            print(f"[오류] 샘플 데이터를 찾을 수 없습니다: {sample_data}")

        elif choice == '1':
            return "GENERATE_RANDOM"

        elif choice == '2':
            if not os.path.isdir(data_dir):
                print("[오류] data/ 디렉토리를 찾을 수 없습니다.")
                continue

            files = sorted(f for f in os.listdir(data_dir) if f.endswith('.txt'))
            if not files:
                print("[오류] data/ 디렉토리에 .txt 파일이 없습니다.")
                continue

            print("\n" + "-"*80)
            print("data/ 디렉토리의 사용 가능한 파일:")
            for i, file in enumerate(files, 1):
                print(f"  {i}. {file}")
            print("-"*80)

            file_choice = input("파일 번호 선택: ").strip()
            if file_choice.isdigit() and 1 <= int(file_choice) <= len(files):
                return os.path.join(data_dir, files[int(file_choice) - 1])
            print("[오류] 잘못된 파일 번호입니다.")

        else:
            print("[오류] 잘못된 선택입니다. 0, 1, 또는 2를 입력하세요.")


def main():
    """메인 함수"""
    print_banner()

    input_file = select_input_file()

    if input_file == "GENERATE_RANDOM":
        print("\n[정보] 랜덤 프로세스 생성 중...")
        processes = InputParser.generate_random_processes(num_processes=10)
        script_dir = os.path.dirname(os.path.abspath(__file__))
        generated_file = os.path.join(script_dir, "data", "generated_input.txt")
        os.makedirs(os.path.dirname(generated_file), exist_ok=True)
        InputParser.save_processes_to_file(processes, generated_file)
    else:
        print(f"\n'{input_file}'에서 프로세스 로딩 중...")
        processes = InputParser.parse_file(input_file)

        if not processes:
            print("\n[오류] 프로세스 로드 실패 또는 파일이 비어있습니다.")
            sys.exit(1)

    InputParser.print_process_summary(processes)

    while True:
        print_configuration_menu()
        choice = get_user_choice()

        if choice == 'all':
            results = run_all_configurations(processes)
        else:
            time_quanta = CONFIGURATIONS[choice]['time_quanta'] or read_custom_quanta()
            result = run_simulation(time_quanta, processes)
            results = [result] if result else []

        if results:
            save_results(results)

        print("\n" + "="*80)
        continue_choice = input("다른 시뮬레이션을 실행하시겠습니까? (y/n): ").strip().lower()
        if continue_choice != 'y':
            print("\nMLFQ 스케줄러 시뮬레이터를 사용해 주셔서 감사합니다!")
            print("="*80 + "\n")
            break


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        print("="*80 + "\n")
        sys.exit(0)
